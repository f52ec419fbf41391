from pydantic import BaseModel
from typing import List

class KMeansResult(BaseModel):
    centroids: List[List[float]]
    assignments: List[int]      # index-aligned with the input vectors
    iterations: int             # reassignment rounds actually performed
    converged: bool             # stopped because centroids stopped moving
    model_config = {"frozen": True}
