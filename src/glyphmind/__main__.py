from glyphmind.cli import main

main()
