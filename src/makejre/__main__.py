from makejre.cli import main

main()
