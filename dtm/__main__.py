from dtm.cli.app import main

main()
