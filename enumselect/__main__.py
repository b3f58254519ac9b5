"""Allow ``python -m enumselect``."""

import sys

from enumselect.cli import main

if __name__ == '__main__':
    sys.exit(main())
