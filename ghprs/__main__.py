import sys

from ghprs.main import main

sys.exit(main())
