from expense_tracker.cli import main

raise SystemExit(main())
