from pioide.cli.app import main

main()
