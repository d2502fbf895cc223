import pathlib
import sys

SCRIPTS = pathlib.Path(__file__).resolve().parents[1] / "python"
if str(SCRIPTS) not in sys.path:
    sys.path.insert(0, str(SCRIPTS))
