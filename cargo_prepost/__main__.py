from cargo_prepost.cli import main

main()
