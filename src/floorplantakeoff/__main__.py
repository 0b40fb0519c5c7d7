"""Allows `python -m floorplantakeoff`."""
from floorplantakeoff.main import main

if __name__ == "__main__":
    main()
