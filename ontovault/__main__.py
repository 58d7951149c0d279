import sys

from ontovault.cli._ontovault import main

sys.exit(main())
