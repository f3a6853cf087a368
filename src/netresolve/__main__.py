from netresolve.main import main

main()
