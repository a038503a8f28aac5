"""
auth — User authentication module.

Provides:
  • Signed token creation & verification
  • Password hashing (bcrypt)
  • Signup / login / logout API routes
  • ``get_current_user`` FastAPI dependency (``x-auth`` header)
"""
