import sys

from commitcoach.proxy.server import main

sys.exit(main())
