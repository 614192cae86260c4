from uosp.cli.app import main

main()
