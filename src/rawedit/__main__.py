from rawedit.cli import main

raise SystemExit(main())
