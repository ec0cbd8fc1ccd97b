import sys

from ccs_semantics.cli import main

sys.exit(main())
