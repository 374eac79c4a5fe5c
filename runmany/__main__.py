"""Permet l'exécution via ``python -m runmany``."""

import sys

from runmany.cli.main import main

sys.exit(main())
