from patternvora.cli import main

raise SystemExit(main())
