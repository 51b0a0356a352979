"""Point configuration and databases at a throwaway directory before any import."""
from __future__ import annotations

import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="mahdia_tests_")

os.environ["MAHDIA_DATABASE__STORE"] = os.path.join(_TMP, "scouts-store.db")
os.environ["MAHDIA_DATABASE__LOGGING"] = os.path.join(_TMP, "logs.db")
os.environ["XDG_CONFIG_HOME"] = os.path.join(_TMP, "config")
