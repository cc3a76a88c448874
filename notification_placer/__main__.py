from notification_placer.launcher import main

raise SystemExit(main())
