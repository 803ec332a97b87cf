import sys

from catalog_ingest.cli import main

sys.exit(main())
