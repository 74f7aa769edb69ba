import sys

from rainlevel.cli import main

sys.exit(main())
