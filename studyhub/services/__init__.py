# Services package.
#
# Each module exposes a focused set of async functions that encapsulate
# business logic and database access for one part of the catalog:
#
#   resource_service    — CRUD + annotated reads + cache for Resource
#   tag_service         — tag catalog and batch tag association
#   vote_service        — like/dislike ledger and vote counts
#   study_list_service  — per-user bookmarks with a studied flag
#   comment_service     — append-only comments on a Resource
#   user_service        — read-only user listing
#   outcomes            — Outcome / BatchOutcome result types
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
