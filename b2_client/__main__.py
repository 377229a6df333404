from b2_client.cli import main

main()
