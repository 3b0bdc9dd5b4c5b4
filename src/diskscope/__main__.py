from diskscope.cli import main

main()
