from ductcalc.cli.main import main

main()
