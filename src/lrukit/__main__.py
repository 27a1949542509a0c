from __future__ import annotations

from lrukit.cli import main

raise SystemExit(main())
