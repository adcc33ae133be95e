# Allow running as `python -m promptonomicon`
import sys

from promptonomicon.cli import main

sys.exit(main())
