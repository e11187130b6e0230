"""Allow ``python -m product_paths``."""

from product_paths.cli.main import main

raise SystemExit(main())
