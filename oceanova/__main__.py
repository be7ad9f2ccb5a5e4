import sys

from oceanova.cli import main

sys.exit(main())
