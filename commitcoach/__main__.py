import sys

from commitcoach.cli.main import main

sys.exit(main())
