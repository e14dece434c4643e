# FILE: signup_api/__main__.py
# Scop:
#   - `python -m signup_api` => același lucru ca scriptul `signup-api` (uvicorn pe HOST/PORT).

from signup_api.run import main

main()
