import sys

from gpg_import.cli import main

sys.exit(main())
