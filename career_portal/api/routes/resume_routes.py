"""
Resume Routes

POST /resume/upload - Upload and parse resume (PDF/DOCX/TXT)
GET /resume/download - Download stored resume
DELETE /resume - Delete resume
GET /resume/analysis - Completeness analysis and suggestions
GET /resume/formats - Get supported formats
"""

import os

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File
from fastapi.responses import FileResponse

from career_portal.core.auth import get_current_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_user_service
from career_portal.services.resume_parsing_service import get_resume_parser, analyze_resume
from career_portal.utils.file_upload import read_upload, delete_resume_file, get_supported_formats
from career_portal.schemas.schemas import MessageResponse

router = APIRouter(prefix="/resume", tags=["Resume"])


@router.post("/upload")
async def upload_resume(
    resume: UploadFile = File(..., description="Resume file (PDF, DOCX, or TXT)"),
    user: User = Depends(get_current_user)
):
    """
    Upload and parse a resume.

    Process:
    1. Extract text from file
    2. Keyword-match skills, contact details and years of experience
    3. Store file, replacing any previous resume
    4. Append newly found skills to the profile
    """
    content, filename, ext = await read_upload(resume)

    parser = get_resume_parser()
    result = parser.process_upload(user, content, filename, ext)

    return {
        "message": "Resume uploaded and parsed successfully",
        "data": result
    }


@router.get("/download")
async def download_resume(user: User = Depends(get_current_user)):
    if not user.resume or not os.path.exists(user.resume.file_path):
        raise HTTPException(status_code=404, detail="Resume not found")

    return FileResponse(user.resume.file_path, filename=user.resume.file_name)


@router.delete("", response_model=MessageResponse)
async def delete_resume(user: User = Depends(get_current_user)):
    if not user.resume:
        raise HTTPException(status_code=404, detail="No resume found to delete")

    delete_resume_file(user.resume.file_path)

    users = get_user_service()
    users.clear_resume(user.id)
    users.log_activity(user.id, "resume_deleted", "Resume deleted successfully")

    return MessageResponse(message="Resume deleted successfully")


@router.get("/analysis")
async def resume_analysis(user: User = Depends(get_current_user)):
    if not user.resume:
        raise HTTPException(status_code=404, detail="No resume data found for analysis")

    return {
        "message": "Resume analysis completed",
        "analysis": analyze_resume(user)
    }


@router.get("/formats")
async def resume_formats():
    """Get supported resume file formats."""
    return get_supported_formats()
