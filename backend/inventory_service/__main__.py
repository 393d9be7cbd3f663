from inventory_service.cli import main

main()
