import sys

from commandeer.main import main

sys.exit(main())
