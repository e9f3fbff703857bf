from fair_rps.cli import main

raise SystemExit(main())
