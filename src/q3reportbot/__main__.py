import sys

from q3reportbot.cli import main

sys.exit(main())
