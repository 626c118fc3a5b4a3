# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Harbour Contributors

from fastapi import APIRouter

from harbour.api.references import router as references_router

v1_router = APIRouter()
v1_router.include_router(references_router)
