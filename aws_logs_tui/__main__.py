from aws_logs_tui.cli import main

raise SystemExit(main())
