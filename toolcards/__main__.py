import sys

from toolcards.engine.cli import main

sys.exit(main())
