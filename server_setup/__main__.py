from server_setup.cli import main

main()
