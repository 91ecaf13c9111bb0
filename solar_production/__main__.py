from solar_production.cli import main

main()
