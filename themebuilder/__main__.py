from themebuilder.cli import main

raise SystemExit(main())
