from cgikit._cli import main

main()
