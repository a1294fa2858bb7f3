"""HTTP and file collaborators: fetch proofs and submit digests for stamping."""
from .server import fetch_proof, load_proof, read_proof_file, submit_stamp  # noqa: F401
