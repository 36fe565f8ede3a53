#!/usr/bin/env python3

# café ordering front end
# usage: ./main.py <dbname> <port> <user> [--password PASSWORD]
# password may also come from $CAFE_DB_PASSWORD (or a .env file)

from cafe.app import main

if __name__ == "__main__":
    main()
