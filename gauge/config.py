"""Environment loading for gauge.

Importing this module loads a ``.env`` file (searched upward from the
current directory) so API keys and ``GAUGE_*`` settings placed there are
visible to the config service and the secrets module. Variables already set
in the environment win.
"""
from dotenv import find_dotenv, load_dotenv

_env_file = find_dotenv(usecwd=True)
if _env_file:
    load_dotenv(_env_file, override=False)
