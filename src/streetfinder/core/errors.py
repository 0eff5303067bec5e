"""
Error taxonomy.

Every failure of a street query surfaces as one of these (or a subclass), so callers
can tell bad input apart from an unreachable or misbehaving upstream service:

- `ValidationError`: a road segment record is malformed (blank name, empty or
  unparsable geometry).
- `TransportError`: fetching a page failed (network error, non-2xx status).
- `ParseError`: a page arrived but is not a usable document.
- `ContractViolation`: a caller passed an invalid argument, or an internal
  invariant broke.

None of them are retried or swallowed inside the package.
"""

from __future__ import annotations


class StreetFinderError(Exception):
    """Base class for all errors raised by streetfinder."""


class ValidationError(StreetFinderError, ValueError):
    pass


class TransportError(StreetFinderError):
    pass


class ParseError(StreetFinderError):
    pass


class ContractViolation(StreetFinderError, ValueError):
    pass
