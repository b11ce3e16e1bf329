import logging
from functools import wraps
from django.shortcuts import render, redirect
from django.contrib import messages

from .models import User

logger = logging.getLogger(__name__)


def session_login_required(view_func):
    """
    Redirects to the login page unless a logged-in user id is stored in the
    session. The user object is attached to the request as ``request.account``.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user_id = request.session.get('user_id')
        if user_id is None:
            return redirect('home')
        try:
            request.account = User.objects.get(id=user_id, status='Active')
        except User.DoesNotExist:
            request.session.flush()
            return redirect('home')
        return view_func(request, *args, **kwargs)
    return wrapper


def Login_Page(request):
    if 'user_id' in request.session:
        return redirect('Dashboard')

    if request.method == 'POST':
        email = request.POST.get('email', '').strip()
        password = request.POST.get('password', '')

        try:
            # Fetch the user from the User table
            user = User.objects.get(email__iexact=email)

            if not user.is_active:
                messages.error(request, 'This account has been deactivated.')
            elif user.check_password(password):
                request.session['user_id'] = user.id
                request.session['usertype'] = user.usertype
                logger.info("User %s logged in", user.email)
                return redirect('Dashboard')
            else:
                messages.error(request, 'Invalid password. Please try again.')
        except User.DoesNotExist:
            messages.error(request, 'User with this email does not exist.')

    return render(request, 'Authentication/Login.html')


def Logout(request):
    request.session.flush()  # This clears all session data
    return redirect('home')
