from theming.cli import main

raise SystemExit(main())
