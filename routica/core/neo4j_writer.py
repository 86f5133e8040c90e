import logging

from neo4j import GraphDatabase

from routica.config import Neo4jSettings

logger = logging.getLogger(__name__)

MERGE_ROUTE = "MERGE (r:Route {method: $method, path: $path})"
MERGE_MIDDLEWARE = """
MATCH (r:Route {method: $method, path: $path})
MERGE (m:Middleware {name: $name})
MERGE (m)-[:GUARDS]->(r)
"""
MERGE_PARAM = """
MATCH (r:Route {method: $method, path: $path})
MERGE (p:Param {name: $name})
MERGE (r)-[:TAKES]->(p)
"""


def _write_routes(tx, routes):
    tx.run("MATCH (n) DETACH DELETE n")
    for route in routes:
        key = {"method": route.method, "path": route.path}
        tx.run(MERGE_ROUTE, **key)
        for name in route.middleware:
            tx.run(MERGE_MIDDLEWARE, name=name, **key)
        for name in route.params:
            tx.run(MERGE_PARAM, name=name, **key)


def push_to_neo4j(routes, settings=None):
    routes = list(routes)
    settings = settings or Neo4jSettings.from_env()
    driver = GraphDatabase.driver(settings.uri, auth=(settings.user, settings.password))
    try:
        with driver.session() as session:
            session.execute_write(_write_routes, routes)
    finally:
        driver.close()
    logger.info("Pushed %d routes to %s", len(routes), settings.uri)
