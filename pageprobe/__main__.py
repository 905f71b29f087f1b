from pageprobe.cli import main

raise SystemExit(main())
