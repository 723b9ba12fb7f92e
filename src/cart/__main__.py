from cart.bootstrap import main

raise SystemExit(main())
