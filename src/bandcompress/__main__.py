import sys

from bandcompressor import main

sys.exit(main())
