import sys

from game2048.main import main

sys.exit(main())
