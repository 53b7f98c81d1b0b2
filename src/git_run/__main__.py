from git_run.cli import main

main()
