from airdroppro.main import main

main()
