from warble.cli import main

main()
