from compatlint.cli import main

raise SystemExit(main())
