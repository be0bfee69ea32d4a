# Ensure project root is on sys.path so 'irc_relay' and 'tests.fixtures' are
# importable when running pytest without an editable install.
import sys
from pathlib import Path

ROOT = Path(__file__).parent.resolve()
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
