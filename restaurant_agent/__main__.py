import sys

from restaurant_agent.main import main

sys.exit(main())
