import sys

from zipcast.cli import main

sys.exit(main())
