import sys

from pagemind.cli import main

sys.exit(main())
