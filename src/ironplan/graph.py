"""
Neo4j graph database connection for the exercise catalog.

Internal Codename: CYBERDYNE-CORE
The exercise knowledge graph the catalog can be loaded from.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from neo4j import Driver, GraphDatabase

from .config import load_config_yaml

logger = logging.getLogger(__name__)


class IronplanGraph:
    """
    Read interface to the exercise graph.

    Connection settings come from the ``neo4j`` section of the config file,
    overridden by NEO4J_* environment variables.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize connection to Neo4j.

        Args:
            config_path: Path to ironplan.yaml. If None, uses default.

        Raises:
            ValueError: If NEO4J_PASSWORD is not set
        """
        config = load_config_yaml(config_path).get("neo4j") or {}

        self.uri = os.getenv("NEO4J_URI", config.get("uri", "bolt://localhost:7687"))
        self.user = os.getenv("NEO4J_USER", config.get("user", "neo4j"))
        self.password = os.getenv("NEO4J_PASSWORD")
        self.database = os.getenv("NEO4J_DATABASE", config.get("database", "neo4j"))

        if not self.password:
            raise ValueError("NEO4J_PASSWORD environment variable must be set")

        self.driver: Driver = GraphDatabase.driver(
            self.uri,
            auth=(self.user, self.password)
        )

    def close(self):
        """Close the database connection."""
        if self.driver:
            self.driver.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def verify_connectivity(self) -> bool:
        """
        Verify that we can connect to Neo4j.

        Returns:
            True if connection successful
        """
        try:
            self.driver.verify_connectivity()
            return True
        except Exception as e:
            logger.error(f"Connection to {self.uri} failed: {e}")
            return False

    def execute_query(
        self,
        query: str,
        parameters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Execute a Cypher query and return results.

        Args:
            query: Cypher query string
            parameters: Optional query parameters

        Returns:
            List of result records as dictionaries
        """
        with self.driver.session(database=self.database) as session:
            result = session.run(query, parameters or {})
            return [dict(record) for record in result]
