import sys

from langchain_sse_replay.cli import main

sys.exit(main())
