"""Release domain: versions, changelog messages and error taxonomy."""

from __future__ import annotations
