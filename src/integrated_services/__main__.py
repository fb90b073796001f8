from integrated_services.cli import main

main()
