"""Allow ``python -m xensieve``."""

from xensieve.main import main

raise SystemExit(main())
