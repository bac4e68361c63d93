from website_checker.main import main

main()
