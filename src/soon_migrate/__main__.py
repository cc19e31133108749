import sys

from soon_migrate.cli import main

sys.exit(main())
