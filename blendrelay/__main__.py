import sys

from blendrelay.main import main

sys.exit(main())
