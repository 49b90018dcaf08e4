from mobile_build_runner.core.cli import main_entry

main_entry()
