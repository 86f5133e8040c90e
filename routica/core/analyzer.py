import logging
from typing import Optional

from routica.config import DiscoveryPolicy
from routica.errors import AnalysisError, FatalDirectoryError, FileError, FileReadError
from routica.models.route import AnalysisResult, Diagnostic
from routica.scanner.express_parser import extract_routes
from routica.scanner.file_scanner import find_candidate_files, is_typescript_project
from routica.scanner.grammar import select_parser

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, str(e)) from e


def analyze_project(path: str, policy: Optional[DiscoveryPolicy] = None) -> AnalysisResult:
    try:
        is_ts = is_typescript_project(path)
    except OSError as e:
        logger.error("Cannot list project directory %s: %s", path, e)
        raise FatalDirectoryError(path, e.strerror or str(e)) from e

    logger.info("Analyzing project: %s (%s)", path, "TypeScript" if is_ts else "JavaScript")
    result = AnalysisResult()

    def skip_listing(error: OSError):
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error)
        result.diagnostics.append(Diagnostic(str(error.filename), "listing", str(error)))

    try:
        files = find_candidate_files(path, is_ts, policy, onerror=skip_listing)
        parser = select_parser(is_ts)
        for file in files:
            try:
                tree = parser.parse(_read_source(file), file)
                result.routes.extend(extract_routes(tree))
            except FileError as e:
                logger.warning("Skipping file %s: %s", file, e.reason)
                result.diagnostics.append(Diagnostic(file, e.kind, e.reason))
            except Exception as e:
                # one bad file never costs the routes of the others
                logger.warning("Error processing file %s", file, exc_info=True)
                result.diagnostics.append(Diagnostic(file, "error", str(e)))
    except OSError as e:
        raise FatalDirectoryError(path, e.strerror or str(e)) from e
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Error analyzing project %s", path)
        raise AnalysisError(f"Error analyzing project: {e}") from e

    logger.info(
        "Found %d routes in %s (%d diagnostics)",
        len(result.routes), path, len(result.diagnostics),
    )
    return result
