from blocklist_sync.app import main

main()
