from list_sidebar.main import main

raise SystemExit(main())
