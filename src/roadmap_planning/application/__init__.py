"""Application layer: command and query services over the roadmap aggregate."""
