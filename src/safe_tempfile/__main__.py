from safe_tempfile.cli import main

main()
