import sys

from goreviser.cli import main

sys.exit(main())
