from typing import Protocol

from database_schema_merge.core.schemas import JoinRelation, Schema


class IJoinExtractor(Protocol):
    def extract(
        self,
        sql_def: str,
        source_table: str,
        default_db: str,
        default_schema: str,
        use_brackets: bool,
    ) -> list[JoinRelation]: ...


class ISchemaLoader(Protocol):
    def load(self, source: str) -> Schema: ...


class ISchemaRepairer(Protocol):
    def repair(self, schema: Schema) -> Schema: ...
