from pagereader.cli import main

raise SystemExit(main())
