"""Sequential lint orchestration: traversal, per-file pipeline, progress and reporting."""

from __future__ import annotations
