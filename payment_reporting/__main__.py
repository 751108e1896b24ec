import sys

from payment_reporting.cli import main

sys.exit(main())
