import sys

from stylegate.cli import main

sys.exit(main())
