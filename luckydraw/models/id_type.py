from sqlalchemy import BigInteger, Integer

# BIGSERIAL on the server; SQLite only autoincrements plain INTEGER primary keys.
ID_TYPE = BigInteger().with_variant(Integer, "sqlite")
