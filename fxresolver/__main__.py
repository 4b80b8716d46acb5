from fxresolver.cli.main import main

raise SystemExit(main())
