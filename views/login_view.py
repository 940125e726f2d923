import streamlit as st

import auth


def render_login(navigate, on_login):
    st.title("🔐 Sign in")
    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")
        if submitted:
            try:
                user, token = auth.sign_in(email, password)
            except auth.InvalidCredentialsError as e:
                st.error(str(e))
            else:
                on_login(user, token)
                st.rerun()

    st.caption("No account yet?")
    st.button("Create one", key="login_to_signup", on_click=navigate, args=("signup",))


def render_signup(navigate, on_login):
    st.title("Create your account")
    with st.form("signup_form", clear_on_submit=True):
        full_name = st.text_input("Full name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        password_confirm = st.text_input("Repeat password", type="password")
        submitted = st.form_submit_button("Sign up", type="primary")
        if submitted:
            if not full_name.strip() or not email.strip():
                st.error("Fill in your name and email.")
            elif len(password) < auth.MIN_PASSWORD_LENGTH:
                st.error(f"Password must be at least {auth.MIN_PASSWORD_LENGTH} characters.")
            elif password != password_confirm:
                st.error("Passwords do not match.")
            else:
                try:
                    result = auth.sign_up(full_name, email, password)
                except auth.UserAlreadyExistsError as e:
                    st.error(str(e))
                except auth.AuthApiError as e:
                    st.error(f"Sign-up failed: {e.message}")
                else:
                    if result is None:
                        st.success("Check your inbox to confirm your email, then sign in.")
                    else:
                        on_login(*result)
                        st.rerun()

    st.button("I already have an account", key="signup_to_login", on_click=navigate, args=("login",))
