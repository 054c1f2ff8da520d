from kubescaffold.cli import main

main()
