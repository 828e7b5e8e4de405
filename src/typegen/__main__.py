from typegen.app import main

main()
