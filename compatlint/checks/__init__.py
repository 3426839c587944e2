"""File-level and repository-level checks.

Every check is read-only: the replay pass runs checks a second time for
failing files and relies on getting the same results. A check that writes
to the repository breaks the final report.
"""

from __future__ import annotations
