"""
So that `python -m arraylang program.json` works the same as the installed script.
"""
from arraylang.cmdline import main

exit(main())
