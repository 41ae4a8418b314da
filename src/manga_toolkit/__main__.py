import sys

from manga_toolkit.cli import main

sys.exit(main())
