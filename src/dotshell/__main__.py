from dotshell.cli import main

main()
