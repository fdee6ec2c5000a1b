"""Write-path orchestration for the contact and order forms."""
