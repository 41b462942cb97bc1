from dtsbundle.cli import main

main()
