"""Allow `python -m ics23_testgen`."""

from ics23_testgen.cli import main

if __name__ == "__main__":
    main()
