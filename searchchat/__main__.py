from searchchat.cli import main

raise SystemExit(main())
