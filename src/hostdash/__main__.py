from hostdash.cli import main

raise SystemExit(main())
