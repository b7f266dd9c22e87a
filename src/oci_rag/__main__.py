import sys

from oci_rag.cli import main

sys.exit(main())
