"""Oracle Database 23ai implementation of the vector-store abstraction."""

from __future__ import annotations

import array
import logging
import re
from typing import Any

import oracledb

from oci_rag.models import Embedding, SearchRequest
from oci_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)

# Table names are interpolated into SQL, so only plain identifiers are allowed.
_IDENTIFIER = re.compile(r"^[A-Za-z][A-Za-z0-9_$#]{0,127}$")

_CREATE_TABLE = """
create table if not exists {table} (
    id        number generated always as identity primary key,
    content   clob,
    embedding vector({dimensions}, FLOAT64)
)"""

_INSERT = "insert into {table} (content, embedding) values (:1, :2)"

_SEARCH = """
select content, embedding, score
from (
    select content, embedding,
           1 - vector_distance(embedding, :vector, COSINE) as score
    from {table}
)
where score >= :min_score
order by score desc
fetch first :max_results rows only"""


def create_pool(
    user: str,
    password: str,
    dsn: str,
    *,
    min_connections: int = 1,
    max_connections: int = 4,
) -> oracledb.ConnectionPool:
    """Create a connection pool for :class:`OracleVectorStore`."""
    logger.info("Creating Oracle connection pool for %s@%s", user, dsn)
    return oracledb.create_pool(
        user=user,
        password=password,
        dsn=dsn,
        min=min_connections,
        max=max_connections,
        increment=1,
    )


def _to_vector(values: list[float]) -> array.array:
    # python-oracledb binds array.array values to VECTOR columns.
    return array.array("d", values)


def _read_text(value: Any) -> str:
    if isinstance(value, oracledb.LOB):
        return value.read()
    return value or ""


class OracleVectorStore(VectorStoreBase):
    """Vector store backed by an Oracle Database ``VECTOR`` column.

    Parameters
    ----------
    pool:
        ``oracledb`` connection pool (see :func:`create_pool`).
    table_name:
        Table holding the embeddings.
    dimensions:
        Vector dimension count; must match the embedding model.
    """

    def __init__(self, pool: oracledb.ConnectionPool, table_name: str, dimensions: int) -> None:
        if not _IDENTIFIER.match(table_name):
            raise ValueError(f"Invalid table name: {table_name!r}")
        super().__init__(table_name, dimensions)
        self._pool = pool

    # -- VectorStoreBase overrides --------------------------------------------

    def create_table_if_not_exists(self) -> None:
        ddl = _CREATE_TABLE.format(table=self.table_name, dimensions=self.dimensions)
        with self._pool.acquire() as connection, connection.cursor() as cursor:
            cursor.execute(ddl)
        logger.info("Ensured vector table %s (%d dimensions)", self.table_name, self.dimensions)

    def add_all(self, embeddings: list[Embedding]) -> None:
        if not embeddings:
            return
        self._check_dimensions(embeddings)
        rows = [(e.content, _to_vector(e.vector)) for e in embeddings]
        with self._pool.acquire() as connection:
            with connection.cursor() as cursor:
                cursor.executemany(_INSERT.format(table=self.table_name), rows)
            connection.commit()
        logger.info("Stored %d embedding(s) in %s", len(rows), self.table_name)

    def search(self, request: SearchRequest) -> list[Embedding]:
        binds = {
            "vector": _to_vector(request.vector),
            "min_score": request.min_score,
            "max_results": request.max_results,
        }
        with self._pool.acquire() as connection, connection.cursor() as cursor:
            cursor.execute(_SEARCH.format(table=self.table_name), binds)
            results = [
                Embedding(content=_read_text(content), vector=list(vector), score=float(score))
                for content, vector, score in cursor.fetchall()
            ]
        logger.debug(
            "Vector search returned %d row(s) (max_results=%d, min_score=%.2f)",
            len(results),
            request.max_results,
            request.min_score,
        )
        return results

    def health_check(self) -> bool:
        try:
            with self._pool.acquire() as connection, connection.cursor() as cursor:
                cursor.execute("select 1 from dual")
                cursor.fetchone()
            return True
        except oracledb.Error:
            logger.warning("Oracle health-check failed", exc_info=True)
            return False

    def drop_table(self) -> None:
        """Drop the backing table if it exists."""
        with self._pool.acquire() as connection, connection.cursor() as cursor:
            cursor.execute(f"drop table if exists {self.table_name} purge")
        logger.info("Dropped vector table %s", self.table_name)
