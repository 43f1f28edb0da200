import sys

from wxsim.cli import main

sys.exit(main())
