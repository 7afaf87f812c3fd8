from savepoints.cli import main

raise SystemExit(main())
